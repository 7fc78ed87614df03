# Routes package init
"""
Postboard Backend — API Routes Package
=========================================

Route Inventory:
    - users.py:     POST /users, POST /login
    - posts.py:     POST/GET /posts, GET/PUT/DELETE /posts/{id}
    - comments.py:  POST/GET /posts/{postId}/comments, PUT/DELETE /comments/{id}
    - health.py:    GET /health

Design Principle:
    Routes are THIN: they pull inputs out of the request, resolve
    dependencies (session, auth gate, token service) and call a service.
"""
