"""
Pydantic schema definitions for API payloads and stored records.

Stored records (users, playlists, items) mirror the layout of the JSON
document one to one and keep unknown keys so that a load/save cycle
never drops data.  Request schemas describe the bodies accepted by
each endpoint.
"""
