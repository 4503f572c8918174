# Supabase table: prayer_requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

prayer_requests:
- id: uuid (primary key)
- member_id: uuid (foreign key to members.id, not null, on delete cascade)
- content: text (not null)
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now())

A trigger on insert/update/delete sets members.updated_at = now() for the
owning member, so editing a prayer request marks the member as recently updated.

Display order is created_at ascending: the oldest request is entry #1.
"""
