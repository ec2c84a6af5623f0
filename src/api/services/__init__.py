# This file marks the services package for content storage and business rules.
# Routers depend on these service classes instead of raw SQL.
