# load_data.py
"""
Load the seed CSVs under data/ into the configured database.

Run scripts/init_db.py first to create the tables.
"""

from scripts.seed import main


if __name__ == "__main__":
    main()
