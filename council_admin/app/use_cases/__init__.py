"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, email verification, password reset
- users/: Administrator approval decisions
- gmail/: Gmail OAuth connection
- settings/: reCAPTCHA settings and cache control
- contacts/: Public contact form

Import from subdirectories.
"""
