"""ASVAB adaptive question sequencing and mastery estimation engine."""
