"""Infrastructure: storage backends, security, locks, built-in catalog."""
