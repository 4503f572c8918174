# Supabase table: small_groups
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

small_groups:
- id: uuid (primary key, default: gen_random_uuid())
- name: text (not null)
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now(), touched by trigger on update)

Deleting a row cascades to members (members.small_group_id ... on delete cascade),
which in turn cascades to prayer_requests.
"""
