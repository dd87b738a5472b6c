"""Timecard package.

Employees record their daily work spans and breaks; worked, overtime and night
minutes are computed on save and an administrator approves the records that
feed the monthly salary estimate.

Organized by feature modules (users, attendance, approvals, payroll) with a thin
Flask controller layer over service/repository layers.
"""
