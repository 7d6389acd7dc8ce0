from typing import Sequence

from aiogram.utils.keyboard import InlineKeyboardBuilder

from secret_santa.services.assignment import AssignmentSet
from secret_santa.services.roster import Participant


def setup_keyboard(participants: Sequence[Participant]):
    keyboard = InlineKeyboardBuilder()
    for participant in participants:
        keyboard.button(text=f"✕ {participant.name}", callback_data=f"remove:{participant.id}")
    if participants:
        keyboard.button(text="Clear list", callback_data="clear")
    keyboard.button(text="Start the draw!", callback_data="draw")
    keyboard.adjust(1)
    return keyboard.as_markup()


def listing_keyboard(assignment_set: AssignmentSet):
    keyboard = InlineKeyboardBuilder()
    for giver in assignment_set.participants():
        keyboard.button(text=f"I am {giver.name}", callback_data=f"reveal:{giver.id}")
    keyboard.button(text="Start over", callback_data="reset")
    keyboard.adjust(1)
    return keyboard.as_markup()


def revealed_keyboard():
    keyboard = InlineKeyboardBuilder()
    keyboard.button(text="Hide", callback_data="hide")
    keyboard.button(text="Start over", callback_data="reset")
    keyboard.adjust(1)
    return keyboard.as_markup()
