"""Seeding, migration and third-party API tooling for the BeFitHub app."""

__version__ = "0.1.0"
