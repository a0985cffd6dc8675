"""Infrastructure services: tokens and email delivery."""
