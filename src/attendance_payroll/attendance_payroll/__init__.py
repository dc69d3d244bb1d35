"""Attendance & payroll core package.

This package is organized by feature modules (timewindow, attendance,
time_entries, payroll, ...) with a thin Flask JSON controller layer on top of
pure calculators and SOLID service/repository layers.
"""
