"""Top-level package for the insurance policy cost service (`policy_cost`, `api`, `common`)."""
