"""Static metadata describing the trivia host."""

APP_NAME = "Trivia Host"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Trivia Host turns a game of rounds, questions and teams into a presentation "
    "with staged answer reveals and live standings for a second screen."
)
