"""Store-access boundary for the service layer."""
