STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUS_COMPLETED = "completed"

STATUS_CHOICES = (
    (STATUS_PENDING, "Pending"),
    (STATUS_APPROVED, "Approved"),
    (STATUS_REJECTED, "Rejected"),
    (STATUS_COMPLETED, "Completed"),
)

CATEGORY_CHOICES = (
    ("education", "Education"),
    ("medical", "Medical"),
    ("food", "Food"),
    ("construction", "Construction"),
    ("emergency", "Emergency"),
    ("other", "Other"),
)

URGENCY_CHOICES = (
    ("low", "Low"),
    ("medium", "Medium"),
    ("high", "High"),
)

# used when a receiver does not define their own steps
DEFAULT_STEPS = [
    {"key": "step-1", "title": "Step 1", "order": 1},
    {"key": "step-2", "title": "Step 2", "order": 2},
    {"key": "step-3", "title": "Step 3", "order": 3},
]
