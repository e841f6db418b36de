"""Channel trivia backend: per-channel turn workflow and score ledger."""
