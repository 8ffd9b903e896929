# Services package init
"""
MindfulSpace Backend — Services Layer
=======================================

What:  Business rules between the routes (HTTP) and the database.
How:   Each service method takes the request's AsyncSession and the caller's
       user id, validates input before touching the store, scopes every
       query to the caller, and raises the application exception taxonomy
       (never a raw SQLAlchemy error).

Service Inventory:
    - AuthService:        register / login (holds the hasher and token service)
    - UserService:        profile read/update, member directory
    - JournalService:     entries, public feed, owner-only edit/delete
    - MoodService:        one mood per day (INSERT … ON CONFLICT upsert)
    - GratitudeService:   gratitude notes
    - FriendService:      requests, responses, connections
    - SupportService:     append-only support interactions
    - StatsService:       dashboard counters
    - AchievementService: catalogue evaluation and unlocks
"""
