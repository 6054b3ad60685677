"""HR Payroll package.

Feature modules (attendance, employees, payroll) with pure computation
stages, Protocol repositories and a thin Flask controller layer.
"""
