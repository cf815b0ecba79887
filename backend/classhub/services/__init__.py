# Services package init
"""
ClassHub Backend — Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and the database.
How:   Services take an AsyncSession plus validated input, go through the
       `store` for every read and write, and return response models.

Service Inventory:
    - Store: generic get/find/save/delete, wraps SQLAlchemy failures
    - access_service: teacher / member authorization of a classroom
    - ClassroomService: classroom creation with teacher/student linking, deletion
    - QuizService: quiz history, start/stop
    - AttendanceService: attendance history built from the roster, check-in
    - PeopleService: teacher and student registration and lookup

Services never commit. The request's session dependency commits once the
handler returns, so every write of a request lands in one transaction.
"""
