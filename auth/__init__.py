"""
auth — User authentication module.

Provides:
  • JWT token issuance & validation (``TokenService``)
  • Password hashing (argon2id)
  • Register / Login API routes
  • ``get_current_identity`` / ``get_owned_todo`` FastAPI dependencies
"""
