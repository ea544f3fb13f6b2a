from dotenv import load_dotenv

# Load environment variables from .env so `flask --app reviewapp.main run` picks them up.
load_dotenv()
