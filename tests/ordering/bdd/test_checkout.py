"""BDD tests for checkout."""

from pytest_bdd import scenarios

scenarios("features/checkout.feature")
