"""rbxts-init — scaffold roblox-ts projects."""

__version__ = "0.1.0"
