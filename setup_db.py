#!/usr/bin/env python3
"""Check the Career Match AI Supabase tables.

Verifies that the required tables exist and prints the schema to create
in the Supabase SQL Editor when they don't.

Usage:
    python setup_db.py
"""

import sys

from career_match_ai.storage.supabase_store import CAREERS_TABLE, MATCHES_TABLE, get_client

SETUP_SQL = """\
-- ── careers ──────────────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS careers (
    id            UUID DEFAULT gen_random_uuid() PRIMARY KEY,
    title         TEXT NOT NULL,
    description   TEXT NOT NULL DEFAULT '',
    industry      TEXT,
    requirements  JSONB NOT NULL DEFAULT '[]',
    skills        JSONB NOT NULL DEFAULT '[]',
    salary_range  JSONB,
    locations     TEXT[] NOT NULL DEFAULT '{}',
    growth_path   JSONB NOT NULL DEFAULT '[]',
    embedding     JSONB,
    is_active     BOOLEAN NOT NULL DEFAULT TRUE,
    created_at    TIMESTAMPTZ NOT NULL DEFAULT now()
);
CREATE INDEX IF NOT EXISTS idx_careers_active ON careers (is_active);

-- ── career_matches ───────────────────────────────────────────────────
CREATE TABLE IF NOT EXISTS career_matches (
    id                   UUID DEFAULT gen_random_uuid() PRIMARY KEY,
    user_id              TEXT NOT NULL,
    career_id            UUID NOT NULL REFERENCES careers(id) ON DELETE CASCADE,
    compatibility_score  INTEGER NOT NULL CHECK (compatibility_score BETWEEN 0 AND 100),
    match_reasons        JSONB NOT NULL DEFAULT '[]',
    skill_gaps           JSONB NOT NULL DEFAULT '[]',
    created_at           TIMESTAMPTZ NOT NULL DEFAULT now()
);
CREATE INDEX IF NOT EXISTS idx_career_matches_user
    ON career_matches (user_id, compatibility_score DESC);
"""

REQUIRED_TABLES = [CAREERS_TABLE, MATCHES_TABLE]


def main() -> int:
    try:
        client = get_client()
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    print("Checking Supabase tables …\n")
    all_ok = True
    for table in REQUIRED_TABLES:
        try:
            client.table(table).select("*").limit(1).execute()
            print(f"  ✓ {table}")
        except Exception as e:
            print(f"  ✗ {table}  - {e}")
            all_ok = False

    if all_ok:
        print("\nAll tables exist. You're good to go!")
        return 0

    print("\n" + "=" * 60)
    print("Some tables are missing. Run the following SQL in the")
    print("Supabase SQL Editor (https://supabase.com/dashboard):\n")
    print(SETUP_SQL)
    print("=" * 60)
    return 1


if __name__ == "__main__":
    sys.exit(main())
