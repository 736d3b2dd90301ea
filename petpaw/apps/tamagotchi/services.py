import logging
from collections import namedtuple

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from .models import MAX_LEVEL, Trophy, VirtualPet

logger = logging.getLogger(__name__)

TrophySpec = namedtuple("TrophySpec", ["name", "category", "threshold", "icon"])

STEP_TROPHIES = (
    TrophySpec("First Steps", Trophy.CATEGORY_STEPS, 1000, "👣"),
    TrophySpec("Walk in the Park", Trophy.CATEGORY_STEPS, 5000, "🌳"),
    TrophySpec("Neighborhood Explorer", Trophy.CATEGORY_STEPS, 10000, "🏘️"),
    TrophySpec("City Wanderer", Trophy.CATEGORY_STEPS, 50000, "🏙️"),
    TrophySpec("Marathon Master", Trophy.CATEGORY_STEPS, 100000, "🏅"),
)
DAY_TROPHIES = (
    TrophySpec("New Friend", Trophy.CATEGORY_DAYS, 1, "🐣"),
    TrophySpec("Bonding Time", Trophy.CATEGORY_DAYS, 7, "🤝"),
    TrophySpec("Loyal Companion", Trophy.CATEGORY_DAYS, 30, "🐕"),
    TrophySpec("Inseparable Duo", Trophy.CATEGORY_DAYS, 90, "👫"),
    TrophySpec("Lifelong Partners", Trophy.CATEGORY_DAYS, 365, "💖"),
)
TROPHIES = {spec.name: spec for spec in STEP_TROPHIES + DAY_TROPHIES}

ACTIONS = {
    "feed": {"hunger": 20, "happiness": 5},
    "play": {"happiness": 15, "energy": -10, "hunger": -5},
    "clean": {"cleanliness": 25, "happiness": 5},
    "sleep": {"energy": 30, "hunger": -5},
}


def perform_action(pet, action):
    try:
        deltas = ACTIONS[action]
    except KeyError:
        raise ValidationError({"action": f"Unknown action {action}."})
    pet.adjust(**deltas)
    pet.save(update_fields=[*deltas, "updated_at"])
    logger.debug(f"Virtual pet {pet.pk} {action}: mood {pet.mood}")
    return pet


def add_steps(pet, steps):
    if steps < 0:
        raise ValidationError({"steps": "Steps cannot be negative."})
    with transaction.atomic():
        pet = VirtualPet.objects.select_for_update().get(pk=pet.pk)
        pet.total_steps += steps
        pet.save(update_fields=["total_steps", "updated_at"])
    return pet


def refresh_level(pet):
    level = min(pet.trophies.count(), MAX_LEVEL)
    if level != pet.level:
        pet.level = level
        pet.save(update_fields=["level", "updated_at"])
    return pet


def earned_trophies(pet, today=None):
    days = pet.day_count(today)
    return [spec for spec in STEP_TROPHIES if pet.total_steps >= spec.threshold] + [
        spec for spec in DAY_TROPHIES if days >= spec.threshold
    ]


def unlock(pet, spec):
    """Returns the new Trophy, or None when the pet already has it"""
    try:
        with transaction.atomic():
            return Trophy.objects.create(
                pet=pet, name=spec.name, category=spec.category, threshold=spec.threshold
            )
    except IntegrityError:
        return None


def check_trophies(pet, today=None):
    """Unlock every trophy the pet has earned and return the newly unlocked ones"""
    owned = set(pet.trophies.values_list("name", flat=True))
    unlocked = [
        trophy
        for trophy in (unlock(pet, spec) for spec in earned_trophies(pet, today) if spec.name not in owned)
        if trophy is not None
    ]
    refresh_level(pet)
    if unlocked:
        logger.info(f"Virtual pet {pet.pk} unlocked {', '.join(t.name for t in unlocked)}")
    return unlocked


def add_trophy(pet, name, today=None):
    spec = TROPHIES.get(name)
    if spec is None:
        raise ValidationError({"name": f"Unknown trophy {name}."})
    if spec not in earned_trophies(pet, today):
        raise ValidationError({"name": f"{name} has not been earned yet."})
    trophy = unlock(pet, spec) or pet.trophies.get(name=name)
    refresh_level(pet)
    return trophy
