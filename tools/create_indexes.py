"""Create the indexes backing the per-user upserts and saved lists.

Run this once after pointing MONGODB_URI at a new database. It only creates
indexes (no document updates).

- user_preferences: one document per user_id (unique)
- user_movies: one document per (user_id, movie_id) (unique)
- movie_lists: listing a user's saved lists newest first

Usage:
    python -m tools.create_indexes
"""

import pprint
import sys

from reelmatch.db import (
    movie_lists_collection,
    user_movies_collection,
    user_preferences_collection,
)

if user_preferences_collection is None:
    print("MONGODB_URI is not set; nothing to do.")
    sys.exit(1)

print("Creating unique index: user_preferences {user_id:1}")
name1 = user_preferences_collection.create_index([("user_id", 1)], unique=True)
print("Created index:", name1)

print("\nCreating unique index: user_movies {user_id:1, movie_id:1}")
name2 = user_movies_collection.create_index([("user_id", 1), ("movie_id", 1)], unique=True)
print("Created index:", name2)

print("\nCreating index: movie_lists {user_id:1, created_at:-1}")
name3 = movie_lists_collection.create_index([("user_id", 1), ("created_at", -1)])
print("Created index:", name3)

for label, coll in (
    ("user_preferences", user_preferences_collection),
    ("user_movies", user_movies_collection),
    ("movie_lists", movie_lists_collection),
):
    print("\n" + "=" * 70)
    print(f"{label} indexes:")
    print("=" * 70)
    pprint.pprint(coll.index_information())
