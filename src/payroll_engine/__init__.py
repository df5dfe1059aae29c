"""Payroll Engine package.

Attendance-to-payroll computation for the HR dashboard: pay policy versions,
attendance classification, daily compensation, period totals and payslips.
Feature modules follow the service/repository split; Flask controllers are a
thin JSON layer on top.
"""
