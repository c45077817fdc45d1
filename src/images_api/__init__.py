"""Images API: validate image uploads and store them in S3."""
