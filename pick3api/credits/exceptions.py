class CreditError(Exception):
    code = 'credit_error'
    status_code = 400


class InsufficientFunds(CreditError):
    code = 'insufficient_credits'

    def __init__(self, required, available):
        self.required = required
        self.available = available
        super().__init__(f'Not enough credits: {required} required, {available} available.')


class NothingToAdjust(CreditError):
    code = 'nothing_to_adjust'

    def __init__(self, balance):
        self.balance = balance
        super().__init__(f'Balance is already {balance}, adjustment would change nothing.')


class AlreadyClaimed(CreditError):
    code = 'already_claimed'

    def __init__(self):
        super().__init__('You have already claimed free credits for this giveaway.')


class ClaimUnavailable(CreditError):
    code = 'giveaway_not_active'
    status_code = 409

    def __init__(self):
        super().__init__('This giveaway is no longer active.')
