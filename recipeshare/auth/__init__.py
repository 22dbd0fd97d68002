"""
Authentication and authorization.

Responsibilities:
- Hash and verify account passwords.
- Issue and verify signed bearer tokens.
- Run the access gate (token, account, suspension and role checks) on
  every protected request.
- Register, authenticate and update accounts.
"""
