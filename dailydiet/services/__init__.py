# Services package init
"""
Daily Diet Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP, services handle ownership and aggregation rules.

Service Inventory:
    - SessionService: session token parsing, lookup and minting
    - UserService: registration with email uniqueness
    - MealService: owner-scoped meal CRUD and the diet summary

Every service is stateless; the AsyncSession is passed into each call.
"""
