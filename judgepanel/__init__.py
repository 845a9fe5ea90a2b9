"""Hackathon judging backend: rosters, rubric scores and leaderboards."""
