"""HandSlap - a pointer-driven hand that slaps a face."""
