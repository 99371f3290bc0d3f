"""System status agent — edge-triggered host health alerts."""
