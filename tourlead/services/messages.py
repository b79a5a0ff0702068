# tourlead/services/messages.py
"""
Caller-facing message texts.

The message is the only failure discriminator callers get, so each failure
kind keeps one stable wording.
"""

# Create / add guides
OFFER_CREATED = "Offer sent successfully!"
OFFER_CREATED_NOT_NOTIFIED = "Offer created, but the email notification could not be sent."
OFFER_CREATE_FAILED = "Could not create the offer in the database."
GUIDES_ADDED = "Guides added to the offer successfully!"
GUIDES_ADDED_NOT_NOTIFIED = "Guides added, but the email notification could not be sent."

# Accept
ACCEPT_NOT_AUTHORIZED = "You are not authorized to accept this offer."
ACCEPT_CONFLICT = "You already have a commitment in this period. You must reject the offer instead."
OFFER_NOT_FOUND = "The offer does not exist."
OFFER_ALREADY_RESOLVED = "This offer has already been resolved."
OFFER_DETAILS_CHANGED = "The offer details have changed. Reload the offer and try again."
COMMITMENT_CREATE_FAILED = "Could not create the commitment. The offer was not accepted."
COMMITMENT_PERMISSION_DENIED = (
    "Permission denied while creating the commitment. The offer was not accepted."
)
ACCEPT_STATUS_UPDATE_FAILED = "Could not update the offer status. The commitment was rolled back."
ACCEPT_ROLLBACK_FAILED = (
    "Could not update the offer status and the commitment could not be rolled back."
)
OFFER_ACCEPTED = "Offer accepted! The company has been notified."
OFFER_ACCEPTED_NOT_NOTIFIED = "Offer accepted, but the company could not be notified by email."

# Reject
OFFER_REJECTED = "Offer rejected."
REJECT_NOT_AUTHORIZED = "You are not authorized to reject this offer."
REJECT_NOT_PENDING = "The offer could not be rejected because it is no longer pending."
REJECT_FAILED = "Could not reject the offer."

# Campaign
CAMPAIGN_CANCELLED = "{count} pending offer(s) cancelled."
CAMPAIGN_NOTHING_PENDING = "There were no pending offers to cancel."
CAMPAIGN_CANCEL_FAILED = "Could not cancel the pending offers."
OFFER_DETAILS_UPDATED = "Offer details updated."
OFFER_DETAILS_NOT_FOUND = "No offers were found to update."
OFFER_DETAILS_UPDATE_FAILED = "Could not update the offer details."

# Remind
REMINDER_NOT_FOUND = "Could not find the offer or it is no longer pending."
REMINDER_INCOMPLETE = "The offer is missing the information needed to send the reminder."
REMINDER_SENT = "Reminder sent to {guide_name}."
REMINDER_SEND_FAILED = "Could not send the reminder email."
REMINDER_LOOKUP_FAILED = "Could not load the offer to send the reminder."

# Ratings
RATING_SAVED = "Rating saved."
RATING_NOT_AUTHORIZED = "You are not authorized to rate this commitment."
RATING_TOO_EARLY = "Ratings can only be submitted after the job has ended."
COMMITMENT_NOT_FOUND = "The commitment does not exist."
RATING_FAILED = "Could not save the rating."

# Subscriptions
SUBSCRIPTION_NOT_ADMIN = "You do not have permission to perform this action."
SUBSCRIPTION_CREATED = "Subscription created successfully!"
SUBSCRIPTION_CREATE_FAILED = "Could not create the subscription."
SUBSCRIPTION_CANCELLED = "Subscription cancelled successfully!"
SUBSCRIPTION_NOT_FOUND = "The subscription does not exist."
SUBSCRIPTION_CANCEL_FAILED = "Could not cancel the subscription."

# Availability
AVAILABILITY_SAVED = "Your calendar has been updated."
AVAILABILITY_SAVE_FAILED = "Could not update your calendar."
GUIDE_NOT_FOUND = "Only guides can manage availability."

UNEXPECTED_ERROR = "An unexpected error occurred. Please try again."
