"""Slack mention bot answering questions from a Bedrock knowledge base."""
