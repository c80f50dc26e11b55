"""
Service layer.

Each service encapsulates the business rules for one area (accounts,
playlists, uploads).  Services receive the store and session table at
construction time, validate their input and ownership first, and only
then mutate the store inside ``Store.transaction`` so that a failed
request never leaves partial changes behind.
"""
