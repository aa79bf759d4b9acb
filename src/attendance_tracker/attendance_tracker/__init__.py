"""Attendance Tracker package.

Organized by feature modules (subjects, attendance, users, stats) with an async
client-side core, an httpx transport and a thin Flask/MySQL backend.
"""
