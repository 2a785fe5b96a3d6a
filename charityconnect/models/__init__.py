# Database models
from .donor import Donor
from .donation import ItemDonation, ItemDonationStatus, MonetaryDonation, MonetaryDonationStatus
from .needy_person import NeedyPerson, NeedyStatus
from .sms_log import SmsLog, SmsStatus
