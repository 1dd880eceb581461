# Routes package init
"""
Daily Diet Backend — API Routes Package
=========================================

Route Inventory:
    - users.py:   POST   /users              (register, issue session cookie)
    - meals.py:   POST   /meals              (create)
                  GET    /meals              (list)
                  GET    /meals/summary      (diet summary)
                  GET    /meals/{id}         (detail)
                  PUT    /meals/{id}         (full replace)
                  DELETE /meals/{id}         (delete)
    - health.py:  GET    /health             (service health check)

Routes are thin: they read the request, call a service with the resolved
owner, and pick the status code.
"""
