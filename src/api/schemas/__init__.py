# This file marks the schemas package for API response models.
# It exists so health, error, and policy cost contracts share one namespace.
