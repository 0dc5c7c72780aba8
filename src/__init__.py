"""SQS to SNS batch relay."""
