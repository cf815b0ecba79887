# Routes package init
"""
ClassHub Backend — API Routes Package
=======================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource; shared chain steps live in
       dependencies.py.

Route Inventory:
    - classrooms.py:   /classrooms, /classrooms/{id}, /classrooms/{id}/students
    - quizzes.py:      /classrooms/{id}/quizzes[...]
    - attendances.py:  /classrooms/{id}/attendances[...]
    - people.py:       /teachers[...], /students[...]
    - health.py:       GET /health

Design Principle:
    Routes stay thin: path/body validation and authorization are declared as
    dependencies, everything else is delegated to a service.
"""
