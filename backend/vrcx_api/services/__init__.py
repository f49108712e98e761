# Services package init
"""
VRCX Companion API — Services Layer (Data Access)
==================================================

What:  Owns every SQL statement the API runs. Route handlers never build SQL.
How:   Stateless service singletons; each call receives the request's
       AsyncSession (injected by FastAPI from the app's Database).

Service Inventory:
    - MemoService:     get / list recent / upsert memos
    - FavoriteService: list (and append) favorite worlds and avatars
    - FeedService:     list recent game log events (clamped limit), record events
    - UserService:     list users (empty list on storage failure)
"""
