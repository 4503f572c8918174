# Supabase table: members
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

members:
- id: uuid (primary key)
- small_group_id: uuid (foreign key to small_groups.id, not null, on delete cascade)
- name: text (not null)
- role: text (not null, default: 'sub_leader') - values: pastor, leader, sub_leader
- photo_url: text (nullable) - path inside the 'photos' storage bucket, or an absolute http(s) URL
- photo_position: jsonb (default: {"x": 50, "y": 50, "zoom": 1})
    x, y: 0-100, CSS background-position percentages
    zoom: 1.0-2.5, background-size = zoom * 100%; older rows may omit it (treated as 1)
- created_at: timestamptz (default: now())
- updated_at: timestamptz (default: now(), touched on update and by prayer_requests changes)

Storage bucket 'photos' (private, read through signed URLs):
- members/{member_id}-{epoch_ms}.jpg
"""
