"""Campus notification service: audience targeting, realtime push and engagement tracking."""
