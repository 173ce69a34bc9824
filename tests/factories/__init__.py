"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, ContactMessageFactory, ...
"""

from tests.factories.admin import DEFAULT_TEST_PASSWORD, AdminUserFactory
from tests.factories.base import BaseFactory, unique_suffix, utc_now
from tests.factories.content import ContactMessageFactory, ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "unique_suffix",
    "utc_now",
    # Admin
    "AdminUserFactory",
    "DEFAULT_TEST_PASSWORD",
    # Content
    "ContactMessageFactory",
    "ProjectFactory",
]
