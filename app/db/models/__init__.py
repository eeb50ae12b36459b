from .device import Device
from .event import Event, EventAd, EventChannel, EventContent
from .label import Label, LabelEvent
from .label_details import SongLabel, AdLabel, ErrorLabel, ProgramLabel, MovieLabel, PromoLabel, SportsLabel

__all__ = [
    'Device', 'Event', 'EventAd', 'EventChannel', 'EventContent', 'Label', 'LabelEvent',
    'SongLabel', 'AdLabel', 'ErrorLabel', 'ProgramLabel', 'MovieLabel', 'PromoLabel', 'SportsLabel',
]
