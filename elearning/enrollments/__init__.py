"""
Enrollments Package

Entitlement store (which account owns which course) and the access gate that
content views consult before serving paid material.
"""
