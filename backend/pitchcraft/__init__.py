"""PitchCraft: turn a startup idea into structured pitch copy."""
