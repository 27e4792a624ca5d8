"""Services package.

Contains the Watch2Gether API client, the SQLite room store and the room
manager that combines them.
"""
