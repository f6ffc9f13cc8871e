"""Coordinators da origem Streamlabs."""
