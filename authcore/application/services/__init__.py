"""Application services: token issue, rotation, audit and the session facade."""
