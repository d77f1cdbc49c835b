# -----------------------------
# UPLOAD PURPOSES
# one sub-directory per purpose under MEDIA_ROOT
# -----------------------------

RECEIVER_PHOTOS = "receiver-photos"
DONOR_PHOTOS = "donor-photos"
RECEIVER_VERIFICATIONS = "receiver-verifications"
DONATION_PROOFS = "donation-proofs"
PROGRESS_MEDIA = "progress-media"
BRANDING = "branding"

UPLOAD_PURPOSES = {
    RECEIVER_PHOTOS,
    DONOR_PHOTOS,
    RECEIVER_VERIFICATIONS,
    DONATION_PROOFS,
    PROGRESS_MEDIA,
    BRANDING,
}


# -----------------------------
# MULTIPART FIELD LIMITS
# -----------------------------

MAX_VERIFICATION_FILES = 12
MAX_PROOF_FILES = 10
MAX_PROGRESS_MEDIA_FILES = 20
