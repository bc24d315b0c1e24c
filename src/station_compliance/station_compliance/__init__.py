"""Station attendance compliance engine.

Feature modules (geofences, shifts, compliance, attendance, violations) each
hold a domain model, a repository Protocol with its MySQL implementation and
a service layer; Flask controllers stay thin.
"""
