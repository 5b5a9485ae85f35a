import os
import sys

import discord
from dotenv import load_dotenv

from animal_derby.bot.manager import AnimalDerbyBot

# Load environment variables from .env file
load_dotenv()
DISCORD_BOT_TOKEN = os.getenv('DISCORD_BOT_TOKEN')
GUILD_ID = os.getenv('DISCORD_GUILD_ID') # Optional: your server ID for instant command sync

def run_bot():
    """Initializes and runs the Discord bot."""
    if not DISCORD_BOT_TOKEN:
        print("FATAL ERROR: DISCORD_BOT_TOKEN not found in .env file.")
        sys.exit(1)

    intents = discord.Intents.default()
    guild_id = int(GUILD_ID) if GUILD_ID else None

    bot = AnimalDerbyBot(command_prefix="!", intents=intents, guild_id=guild_id)

    try:
        print("Starting Discord bot...")
        bot.run(DISCORD_BOT_TOKEN)
    except Exception as e:
        print(f"Error running bot: {e}")

if __name__ == "__main__":
    run_bot()
