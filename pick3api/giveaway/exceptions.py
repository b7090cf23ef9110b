class GiveawayError(Exception):
    """
    Base for every rejection the giveaway engine reports to a caller.

    ``code`` is a stable machine readable kind, ``status_code`` the HTTP status
    the API answers with.
    """
    code = 'giveaway_error'
    status_code = 400


# Validation

class InvalidSlot(GiveawayError):
    code = 'invalid_slot'

    def __init__(self, min_slot, max_slot):
        self.min_slot = min_slot
        self.max_slot = max_slot
        super().__init__(f'Slot must be between {min_slot} and {max_slot}.')


class InvalidPickNumber(GiveawayError):
    code = 'invalid_pick_number'

    def __init__(self):
        super().__init__('Pick number must be between 000 and 999.')


class InvalidDrawResult(GiveawayError):
    code = 'invalid_draw_result'

    def __init__(self):
        super().__init__('Pick 3 result must be a 3-digit number (000-999).')


# State conflicts

class StateConflict(GiveawayError):
    code = 'state_conflict'
    status_code = 409


class GiveawayNotAcceptingPicks(StateConflict):
    code = 'not_accepting_picks'

    def __init__(self):
        super().__init__('This giveaway is no longer accepting picks.')


class EntryCutoffPassed(StateConflict):
    code = 'entry_cutoff_passed'

    def __init__(self):
        super().__init__('Entry cutoff has passed.')


class AlreadyCompleted(StateConflict):
    code = 'already_completed'

    def __init__(self):
        super().__init__('Giveaway already completed.')


class AlreadyCancelled(StateConflict):
    code = 'already_cancelled'

    def __init__(self):
        super().__init__('Giveaway is already cancelled.')


class CannotCancelCompleted(StateConflict):
    code = 'cannot_cancel_completed'

    def __init__(self):
        super().__init__('Cannot cancel a completed giveaway.')


class InvalidTransition(StateConflict):
    code = 'invalid_transition'

    def __init__(self, current, target, detail=None):
        self.current = current
        self.target = target
        super().__init__(detail or f'Cannot move a {current} giveaway to {target}.')


# Resources

class NoFreeEntriesRemaining(GiveawayError):
    code = 'no_free_entries'

    def __init__(self, allowed):
        self.allowed = allowed
        super().__init__(f'No free entries remaining ({allowed} of {allowed} used).')


class InsufficientCredits(GiveawayError):
    code = 'insufficient_credits'

    def __init__(self, required, available, box_topper=False):
        self.required = required
        self.available = available
        self.box_topper = box_topper
        if box_topper:
            message = f'Box topper requires {required} credits. You have {available}.'
        else:
            message = (
                f'Not enough credits ({required} required, {available} available). '
                'Use a free entry or purchase more credits.'
            )
        super().__init__(message)


# Uniqueness

class DuplicatePick(GiveawayError):
    code = 'duplicate_pick'

    def __init__(self, slot, pick_number):
        super().__init__(f'You already have pick {pick_number} in slot {slot}.')


class InvariantViolation(Exception):
    """
    Internal consistency failure. Never shown to users, it aborts the
    surrounding transaction.
    """
