"""
Users Package

Account profiles and roles. Authentication itself is JWT based
(see `backend.custom_auth`); this package only adds the marketplace role.
"""
