"""Attendance & payroll engine package.

Feature modules (attendance, reports, payroll, workers) each keep a model,
a repository interface and a service layer; Flask controllers stay thin.
"""
