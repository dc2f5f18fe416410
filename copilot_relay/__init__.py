"""A GitHub Copilot extension relay that reviews code through the Copilot LLM."""
