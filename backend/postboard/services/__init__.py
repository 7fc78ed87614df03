# Services package init
"""
Postboard Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services accept a session plus validated inputs, apply business rules,
       and return response schemas. They never see Request objects.

Service Inventory:
    - UserService: registration and login
    - PostService: post CRUD with ownership checks
    - CommentService: comment CRUD scoped under a post
"""
