"""Community marketplace API: phone OTP sign-in, resident registration and neighbour services."""
