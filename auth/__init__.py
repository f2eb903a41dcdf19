"""
auth: User authentication module.

Provides:
  • Signed, non-expiring session tokens
  • Password hashing (bcrypt)
  • Register / Login API routes
  • ``require_user`` access guard dependency
"""
