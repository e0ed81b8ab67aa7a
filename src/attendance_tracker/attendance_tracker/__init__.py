"""Attendance Tracker package.

This package is organized by feature modules (employees, attendance, organization,
reports, transfer) around a single in-memory repository, with a thin Flask
controller layer and pluggable key/value storage backends.
"""
