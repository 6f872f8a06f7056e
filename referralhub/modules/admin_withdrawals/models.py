# Supabase table: withdrawals (columns in transactions/models.py)
# Admins move a withdrawal through its review states; each change is audited in
# admin_activity_logs with action UPDATE_WITHDRAWAL_STATUS.

WITHDRAWAL_STATUSES = ("pending", "processing", "completed", "failed", "cancelled")

ALLOWED_TRANSITIONS = {
    "pending": {"processing", "completed", "failed", "cancelled"},
    "processing": {"completed", "failed"},
}
