"""Registration, sign-in and the session store."""
