"""
core: todo actions and the error taxonomy.
"""
