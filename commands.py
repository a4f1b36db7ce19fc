# Quick reference commands (run from repo root). These are comments only; copy/paste as needed.

# Install the project with test dependencies (includes httpx for TestClient)
# python -m pip install -e ".[test]"

# Run the full test suite
# python -m pytest

# Run focused test files
# python -m pytest tests/test_auth_service.py tests/test_auth_flow.py
# python -m pytest tests/test_user_store.py tests/test_sessions.py
# python -m pytest tests/test_validation.py tests/test_security_headers.py tests/test_rate_limits.py
# python -m pytest tests/test_email_notifier.py
# python -m pytest tests/test_wellness.py tests/test_media.py

# Start the API locally (with env vars loaded)
# python -m dotenv run -- python -m uvicorn app.api:app --reload --port 5000
# or: python main.py

# Minimal local .env
# DATABASE_URL=sqlite:///./empaai.db
# PUBLIC_BASE_URL=http://localhost:5000
# (leave SMTP_* unset to get verification/reset links in the log)

# Inspect the database (example query)
# python scripts/db_shell.py "SELECT id,email,user_type,email_verified,created_at FROM users"
# python scripts/db_shell.py "SELECT id,user_id,expires_at FROM sessions ORDER BY created_at DESC LIMIT 5"
