"""Account domain: constraint validators over the account repository."""
