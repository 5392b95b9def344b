"""School reporting service package.

Organized by feature modules (students, attendance, assessments, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
