"""Service layer for ujcon.

Services sequence domain and infrastructure calls and return a
:class:`~ujcon.services.result.ServiceResult` instead of raising.
"""
