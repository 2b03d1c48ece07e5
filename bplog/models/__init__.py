from .reading import Reading, TimeSlot, new_reading_id
