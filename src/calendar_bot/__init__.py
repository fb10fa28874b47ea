"""Calendar bot.

Answers pending Google Calendar invitations on behalf of one user: events
that overlap something already accepted on the same day are declined, all
others are accepted.
"""

__version__ = "0.1.0"
