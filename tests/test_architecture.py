"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on application or adapters
- Application services don't depend on adapters
- Adapters depend on domain and only on the shared input validators of the application layer
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should not import any other modules except standard library and domain models."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("nearby_bikes.domain.models*")
        .should_not_import("nearby_bikes.adapters*")
        .should_not_import("nearby_bikes.application*")
        .should_not_import("nearby_bikes.domain.contracts*")
        .should_not_import("nearby_bikes.domain.ports*")
        .should_not_import("nearby_bikes.domain.errors")
        .may_import("nearby_bikes.domain.models*")
        .check("nearby_bikes", only_direct_imports=True)
    )


def test_domain_contracts_and_ports_have_no_dependencies() -> None:
    """Domain contracts and ports should not import adapters or application."""
    (
        archrule("domain contracts", comment="Domain contracts should be independent")
        .match(
            "nearby_bikes.domain.contracts*",
            "nearby_bikes.domain.ports*",
            "nearby_bikes.domain.errors",
        )
        .should_not_import("nearby_bikes.adapters*")
        .should_not_import("nearby_bikes.application*")
        .check("nearby_bikes", only_direct_imports=True)
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("nearby_bikes.application*")
        .should_not_import("nearby_bikes.adapters*")
        .should_not_import("nearby_bikes.cli")
        .should_not_import("nearby_bikes.main")
        .check("nearby_bikes", only_direct_imports=True)
    )


def test_adapters_dont_import_application_services() -> None:
    """Adapters should only reuse the input validators of the application layer."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("nearby_bikes.adapters*")
        .should_not_import("nearby_bikes.application*")
        .may_import("nearby_bikes.application.validators")
        .should_not_import("nearby_bikes.cli")
        .should_not_import("nearby_bikes.main")
        .check("nearby_bikes", only_direct_imports=True)
    )
