from enum import Enum, IntEnum


class Score(IntEnum):
    BLACKOUT = 0
    INCORRECT = 1
    INCORRECT_FAMILIAR = 2
    DIFFICULT = 3
    HESITANT = 4
    PERFECT = 5


SCORE_LABELS = {
    Score.BLACKOUT: "Esqueci",
    Score.INCORRECT: "Errei",
    Score.INCORRECT_FAMILIAR: "Quase",
    Score.DIFFICULT: "Mais ou Menos",
    Score.HESITANT: "Bem",
    Score.PERFECT: "Perfeito",
}


class CardStage(str, Enum):
    NEW = "new"
    LEARNING = "learning"
    MATURE = "mature"
