"""
Soil Advisor Backend
====================

This is the Python package for the backend API.

HOW IT'S ORGANIZED:
------------------
- models/    = Data structures (readings, parsed advice)
- services/  = Workers (AI team, weather, token checks, advice parsing)
- routers/   = API endpoints (the doors into our app)
- utils/     = Small validation helpers
- main.py    = Puts it all together and starts the server
- cli.py     = Try the advice parser from a terminal
"""
