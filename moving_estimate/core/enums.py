from enum import Enum


class PackageType(str, Enum):
    BOX = "box"
    BED = "bed"
    BICYCLE = "bicycle"
    WASHING_MACHINE = "washing_machine"

    def __str__(self):
        return self.value


class OptionalServiceType(str, Enum):
    WASHING_MACHINE = "washing_machine"

    def __str__(self):
        return self.value
