"""Static reference data: breeders, known varieties and care options."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoseInfo:
    """Library defaults for a known variety."""

    type: int
    feature: str


@dataclass(frozen=True)
class Option:
    value: str
    label: str


@dataclass(frozen=True)
class Issue:
    """A pest/disease quick-record button."""

    label: str
    kind: str  # DISEASE | PEST | PREVENTION


BREEDERS: dict[str, list[str]] = {
    "ロサオリエンティス (Rosa Orientis)": [
        "シェエラザード", "オデュッセイア", "ダフネ", "マイローズ", "シャリマー",
        "リュシオール", "トロイメライ", "プラリエ", "リラ", "カミーユ",
    ],
    "デビットオースチン (David Austin)": [
        "オリビア・ローズ・オースチン", "ボスコベル", "ガブリエル・オーク",
        "ユーステイシア・ヴァイ", "デスデモーナ", "レディ・エマ・ハミルトン",
        "クイーン・オブ・スウェーデン", "ジュード・ジ・オブスキュア",
        "ゴールデン・セレブレーション", "プリンセス・アレキサンドラ・オブ・ケント",
    ],
    "河本バラ園 (Kawamoto Rose)": [
        "ガブリエル", "ルシファー", "ラ・マリエ", "プリュム", "サフィレット",
        "コフレ", "シュシュ", "ミスティ・パープル",
    ],
    "ローズトメルスリー (Rose de Mulsanne)": [
        "サマルカンド", "コフレ", "プティ・プランス", "エール", "カタン",
        "ローブ・ア・ラ・フランセーズ",
    ],
    "京成バラ園 (Keisei Rose)": [
        "快挙", "恋結び", "しののめ", "ローズうらら", "薫乃", "桃香", "結愛", "ほのか",
        "アミ・ロマンティカ",
    ],
    "メイアン (Meilland)": [
        "ピエール・ドゥ・ロンサール", "パパ・メイアン", "ボレロ", "マイ・ガーデン",
        "レオナルド・ダ・ヴィンチ", "ミミ・エデン",
    ],
    "デルバール (Delbard)": [
        "ナエマ", "クロード・モネ", "ラ・パリジェンヌ", "ローズ・ポンパドゥール",
        "エドゥアール・マネ", "シャンテ・ロゼ・ミサト", "ソレイユ・ヴァルティカル",
    ],
    "タンタウ (Tantau)": [
        "ノスタルジー", "アスコット", "レイニー・ブルー", "アスピリン・ローズ",
        "バイランド", "カフェ",
    ],
}

FERTILIZERS: list[Option] = [
    Option("VITALIZER", "活力剤 (Vitalizer)"),
    Option("SOLID", "固形肥料 (Solid)"),
    Option("LIQUID", "液体肥料 (Liquid)"),
]

TRANSPLANT_TYPES: list[Option] = [
    Option("TRANSPLANT", "植え替え (Repotting)"),
    Option("POT_UP", "鉢増し (Pot Up)"),
    Option("SOIL_RENEWAL", "用土替え (Soil Renewal)"),
    Option("GROUND", "地植え (Planting in Ground)"),
]

SOIL_TYPES: list[Option] = [
    Option("PREMIUM_ROSE", "プレミアムローズ培養土 (Premium)"),
    Option("BIOGOLD", "バイオゴールドの土 (Biogold)"),
    Option("AUSTIN", "オースチンバラの土 (Austin)"),
    Option("BARANOIE", "バラの家 培養土 (Baranoie)"),
    Option("HYPONEX", "ハイポネックス バラの培養土"),
    Option("AKADAMA", "赤玉土 (Akadama)"),
    Option("COMPOST", "堆肥 (Compost)"),
    Option("PEAT", "ピートモス (Peat Moss)"),
    Option("OTHER", "その他 (Other)"),
]

ISSUES: list[Issue] = [
    Issue("黒星病 (Black Spot)", "DISEASE"),
    Issue("うどんこ病 (Mildew)", "DISEASE"),
    Issue("アブラムシ (Aphids)", "PEST"),
    Issue("コガネムシ (Beetles)", "PEST"),
    Issue("チュウレンジハバチ (Sawfly)", "PEST"),
    Issue("カイガラムシ (Scale)", "PEST"),
    Issue("薬剤散布 (Spray Prevention)", "PREVENTION"),
]

# Auto-fill for disease-resistance type and description on registration.
ROSE_LIBRARY: dict[str, RoseInfo] = {
    # Rosa Orientis
    "シェエラザード": RoseInfo(1, "Deep pink, pointed petals, strong damask scent. Very distinct."),
    "オデュッセイア": RoseInfo(
        2, "Bluish crimson, wavy petals, rich damask fragrance. Climber potential."
    ),
    "ダフネ": RoseInfo(1, "Soft pink ruffles, fades to green. Excellent disease resistance."),
    "マイローズ": RoseInfo(0, "Type 0 resistance! Pure red, compact, continuous bloomer."),
    "シャリマー": RoseInfo(0, "Soft pink to white gradient. Highly resistant (Type 0) and fragrant."),
    "リュシオール": RoseInfo(0, "Bright yellow, Type 0. Compact and disease resistant."),
    "トロイメライ": RoseInfo(0, "Pink apricot blend. Very fragrant and highly resistant."),
    "リラ": RoseInfo(0, "Lilac purple. Type 0. Deep fragrance and classic shape."),
    # David Austin
    "オリビア・ローズ・オースチン": RoseInfo(
        1, "Soft pink cupped rosettes. Fruity fragrance. Extremely healthy."
    ),
    "ボスコベル": RoseInfo(2, "Rich salmon-pink. Complex myrrh and hawthorn fragrance."),
    "ガブリエル・オーク": RoseInfo(1, "Deep pink, many petalled rosette. Strong fruity fragrance."),
    "ユーステイシア・ヴァイ": RoseInfo(2, "Soft apricot-pink. Intense fruity fragrance."),
    "デスデモーナ": RoseInfo(1, "Peachy pink buds opening to white. Old rose fragrance."),
    "レディ・エマ・ハミルトン": RoseInfo(
        2, "Tangerine orange-yellow. Strong fruity scent. Dark bronze foliage."
    ),
    "クイーン・オブ・スウェーデン": RoseInfo(
        2, "Soft pink, upright growth. Myrrh fragrance. Very elegant."
    ),
    "ジュード・ジ・オブスキュア": RoseInfo(3, "Buff yellow. Extremely strong citrus/guava fragrance."),
    # Kawamoto
    "ガブリエル": RoseInfo(
        3, "Pure white with purple center. Heavenly scent but requires care (Type 3)."
    ),
    "ルシファー": RoseInfo(3, "Pale lilac, mysterious beauty. Needs protection from pests/disease."),
    "ラ・マリエ": RoseInfo(2, "Frilly pink petals, distinct scent. 'The Bride'."),
    "サフィレット": RoseInfo(2, "White with mauve shading. Unique vintage look."),
    "コフレ": RoseInfo(2, "Mauve/Green outer petals. Excellent vase life. Very popular."),
    # Delbard
    "ナエマ": RoseInfo(
        2, "Soft pink, cup-shaped. Intense fruity/citrus fragrance. Vigorous climber."
    ),
    "クロード・モネ": RoseInfo(2, "Pink with yellow stripes. Very painterly. Good scent."),
    "ラ・パリジェンヌ": RoseInfo(1, "Orange, yellow, pink blend. Very free flowering and healthy."),
    "エドゥアール・マネ": RoseInfo(2, "Light yellow with pink stripes. Fruity fragrance. Climber."),
    # Meilland
    "ピエール・ドゥ・ロンサール": RoseInfo(
        2, "Creamy white with pink edge. World's favorite climber. Mild scent."
    ),
    "ボレロ": RoseInfo(1, "Pure white, packed with petals. Strong fruity fragrance. Compact."),
    "レオナルド・ダ・ヴィンチ": RoseInfo(1, "Bengal pink. Very tough, rain resistant. Mild scent."),
    # Keisei
    "快挙": RoseInfo(1, "Bright yellow, large flowers. Good resistance."),
    "薫乃": RoseInfo(2, "Soft cream/pink. Incredible fragrance (Perfume industry standard)."),
    "ローズうらら": RoseInfo(1, "Shocking pink. Extremely robust and floriferous."),
    # Tantau
    "レイニー・ブルー": RoseInfo(2, "Violet-blue clusters. Gentle climber. Very popular in Japan."),
    "ノスタルジー": RoseInfo(1, "Cherry red edges, creamy white center. Distinct bi-color."),
}


def lookup_rose(name: str) -> RoseInfo | None:
    return ROSE_LIBRARY.get(name)


def label_for(options: list[Option], value: str) -> str | None:
    """Return the label of the option with ``value``, or None."""
    for option in options:
        if option.value == value:
            return option.label
    return None


def short_label(text: str) -> str:
    """Strip the parenthesised gloss: ``"赤玉土 (Akadama)"`` -> ``"赤玉土"``."""
    return text.split(" (")[0].split("(")[0].strip()


def resistance_label(rose_type: int | float | None) -> str:
    """Human readable disease-resistance tier."""
    if rose_type is None:
        return "Type ?"
    if rose_type == 0:
        return "Type 0 (highly resistant)"
    if rose_type >= 3:
        return f"Type {rose_type} (needs care)"
    return f"Type {rose_type}"
