"""Student attendance tracker package.

Organized by feature modules (sessions, attendance, statistics, ...) with a
thin Flask controller layer over service and repository layers backed by
MongoDB.
"""
