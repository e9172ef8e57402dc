"""One-off seeding, migration and lookup scripts.

Each module is runnable on its own:

    python -m befithub.scripts.seed_exercises --input catalog.json
"""
