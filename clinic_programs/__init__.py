"""
Clinic Programs API.

Doctors and admins register clients, define clinical programs and enroll
clients into programs with an ACTIVE / COMPLETED / DROPPED status.
"""
