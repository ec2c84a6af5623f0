# This file marks the routers package for API route modules.
# Each module owns one resource: blogs, services, team, clientage, contacts, and health.
