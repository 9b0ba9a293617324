"""Core gameplay primitives (kinematics, scoring, ranking and text rendering).

Kept free of FastAPI and Redis concerns so it can be reused by the engine, API routes and tests.
"""
