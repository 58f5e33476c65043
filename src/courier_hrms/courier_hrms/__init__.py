"""Courier HRMS package.

Feature modules (users, reports, payroll, payslips, ingestion, ...) sit behind a
thin Flask controller layer with service/repository layers underneath.
"""
