class Midi2AssError(RuntimeError):
    pass


class MidiReadError(Midi2AssError):
    pass


class MissingHeaderError(Midi2AssError):
    pass


class AlignmentError(Midi2AssError):
    pass
