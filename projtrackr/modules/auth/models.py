# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth calls used here:
- auth.admin.create_user() - Register new users with email pre-confirmed
  (service role key; no confirmation mail is sent)
- auth.sign_in_with_password() - Authenticate users, issue the bearer token
- auth.get_user() - Verify a bearer token and load the user
- auth.admin.update_user_by_id() - Write profile fields to user_metadata

User metadata keys: name, full_name, avatar_url.
"""
