"""Create the database schema and seed the default forum categories."""

import logging

from townhall.main import init_schema

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_schema()
    print("Database initialized.")
