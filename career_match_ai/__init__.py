"""Career Match AI: embedding + rule-based career matching with explanations and skill gaps."""

__version__ = "0.1.0"
