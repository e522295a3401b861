"""Student Portal backend package.

Organized by feature modules (students, justifications, schedules, ...) with a
thin Flask controller layer on top of service and repository layers.
"""
