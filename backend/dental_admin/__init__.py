"""Dental clinic admin dashboard backend."""
