"""Timeclock package.

Feature modules (punches, payroll, users) each keep a pure domain core,
a repository interface with concrete storage, a service layer and a thin
Flask controller.
"""
