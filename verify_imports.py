import sys
import os

# Add project root to path
sys.path.append(os.getcwd())

print("Verifying imports...")

try:
    print("Importing talent_screen.main...")
    from talent_screen import main
    print("✅ talent_screen.main imported")

    print("Importing talent_screen.api.functions...")
    from talent_screen.api import functions
    print("✅ talent_screen.api.functions imported")

    print("Importing talent_screen.api.job_documents...")
    from talent_screen.api import job_documents
    print("✅ talent_screen.api.job_documents imported")

    print("Importing talent_screen.services.job_document_uploader...")
    from talent_screen.services import job_document_uploader
    print("✅ talent_screen.services.job_document_uploader imported")

    print("🚀 All imports successful!")

except Exception as e:
    print(f"❌ Import failed: {e}")
    sys.exit(1)
