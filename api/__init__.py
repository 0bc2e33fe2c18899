"""
Webhook proxy app.
"""
