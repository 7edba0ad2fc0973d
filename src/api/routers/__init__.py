# This file marks the routers package for API route modules.
# It exists so health and policy routes can be registered from one import path.
