"""
Pytest markers for the dental clinic admin tests.

Kept out of conftest.py so test categorization stays in one place.
"""


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "auth: mark test as authentication-related")
    config.addinivalue_line("markers", "api: mark test as API endpoint test")
    config.addinivalue_line("markers", "storage: mark test as key-value store test")
    config.addinivalue_line("markers", "repositories: mark test as repository test")
    config.addinivalue_line("markers", "services: mark test as service layer test")
    config.addinivalue_line("markers", "appointment: mark test as appointment-related")
    config.addinivalue_line("markers", "patient: mark test as patient-related")
    config.addinivalue_line("markers", "dashboard: mark test as dashboard-related")
    config.addinivalue_line(
        "markers", "search: mark test as related to search functionality"
    )
