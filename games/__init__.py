"""Games built on the slapstick engine."""
