from dotenv import load_dotenv

# Load environment variables from .env file so LOG_LEVEL and friends are
# visible before settings are built
load_dotenv()
