"""Built-in word lists used by the quality filter and the lemmatizer.

``COMMON_WORDS`` and ``DEFAULT_NAMES`` together form the base whitelist: words
that carry no stylistic signal on their own. ``LEMMAS`` maps inflected forms to
their base form and is only ever used as a dictionary lookup.
"""

from __future__ import annotations

COMMON_WORDS: frozenset[str] = frozenset({
    # articles, determiners, pronouns
    "a", "an", "the", "this", "that", "these", "those", "some", "any", "each",
    "every", "all", "both", "few", "many", "much", "more", "most", "other",
    "another", "such", "no", "none", "own", "same",
    "i", "me", "my", "mine", "myself", "you", "your", "yours", "yourself",
    "he", "him", "his", "himself", "she", "her", "hers", "herself", "it", "its",
    "itself", "we", "us", "our", "ours", "ourselves", "they", "them", "their",
    "theirs", "themselves", "who", "whom", "whose", "which", "what",
    "someone", "something", "anyone", "anything", "everyone", "everything",
    "nobody", "nothing",
    # prepositions and conjunctions
    "and", "or", "but", "nor", "so", "yet", "for", "of", "in", "on", "at", "to",
    "from", "by", "with", "without", "into", "onto", "upon", "over", "under",
    "about", "above", "below", "after", "before", "between", "through",
    "during", "against", "among", "around", "across", "along", "behind",
    "beside", "beyond", "near", "off", "out", "up", "down", "toward", "towards",
    "if", "then", "than", "because", "while", "when", "where", "why", "how",
    "though", "although", "until", "unless", "since", "as", "like",
    # auxiliaries and very common verbs
    "is", "am", "are", "was", "were", "be", "been", "being", "do", "does",
    "did", "done", "doing", "have", "has", "had", "having", "will", "would",
    "shall", "should", "can", "could", "may", "might", "must",
    "go", "goes", "went", "gone", "get", "gets", "got", "make", "makes", "made",
    "say", "says", "said", "see", "sees", "saw", "seen", "know", "knows",
    "knew", "think", "thinks", "thought", "take", "takes", "took", "come",
    "comes", "came", "want", "wants", "wanted", "look", "looks", "looked",
    "give", "gives", "gave", "use", "used", "find", "found", "tell", "told",
    "ask", "asked", "seem", "seemed", "feel", "feels", "felt", "try", "tried",
    "leave", "left", "call", "called", "keep", "kept", "let", "put", "mean",
    "meant",
    # contractions
    "i'm", "you're", "he's", "she's", "it's", "we're", "they're", "i've",
    "you've", "we've", "they've", "i'll", "you'll", "he'll", "she'll",
    "we'll", "they'll", "i'd", "you'd", "he'd", "she'd", "we'd", "they'd",
    "isn't", "aren't", "wasn't", "weren't", "don't", "doesn't", "didn't",
    "can't", "couldn't", "won't", "wouldn't", "shouldn't", "haven't",
    "hasn't", "hadn't", "that's", "there's", "what's", "let's",
    # adverbs and fillers
    "not", "just", "also", "very", "too", "only", "even", "still", "now",
    "here", "there", "again", "ever", "never", "always", "often", "once",
    "already", "almost", "really", "quite", "rather", "well", "back", "away",
    "perhaps", "maybe", "yes", "oh", "okay", "ok",
    # common nouns and adjectives
    "time", "day", "way", "thing", "things", "man", "woman", "people", "one",
    "two", "first", "last", "new", "old", "good", "bad", "little", "big",
    "long", "great", "right", "next",
})

DEFAULT_NAMES: frozenset[str] = frozenset({
    "alex", "alice", "amelia", "anna", "ava", "ben", "charlie", "chloe",
    "daniel", "david", "elena", "eli", "elizabeth", "ella", "emily", "emma",
    "ethan", "grace", "hannah", "henry", "isaac", "isabella", "jack", "jacob",
    "james", "jane", "john", "julia", "kate", "leo", "liam", "lily", "lucas",
    "lucy", "maria", "mark", "mary", "max", "mia", "michael", "noah", "oliver",
    "olivia", "rose", "ryan", "sam", "sarah", "sophia", "thomas", "william",
    "zoe",
})

LEMMAS: dict[str, str] = {
    # be / have / do
    "am": "be", "is": "be", "are": "be", "was": "be", "were": "be",
    "been": "be", "being": "be",
    "has": "have", "had": "have", "having": "have",
    "does": "do", "did": "do", "done": "do", "doing": "do",
    # irregular verbs common in narration
    "went": "go", "gone": "go", "goes": "go", "going": "go",
    "got": "get", "gets": "get", "getting": "get", "gotten": "get",
    "made": "make", "makes": "make", "making": "make",
    "said": "say", "says": "say", "saying": "say",
    "saw": "see", "seen": "see", "sees": "see", "seeing": "see",
    "knew": "know", "known": "know", "knows": "know", "knowing": "know",
    "thought": "think", "thinks": "think", "thinking": "think",
    "took": "take", "taken": "take", "takes": "take", "taking": "take",
    "came": "come", "comes": "come", "coming": "come",
    "gave": "give", "given": "give", "gives": "give", "giving": "give",
    "found": "find", "finds": "find", "finding": "find",
    "told": "tell", "tells": "tell", "telling": "tell",
    "felt": "feel", "feels": "feel", "feeling": "feel",
    "left": "leave", "leaves": "leave", "leaving": "leave",
    "kept": "keep", "keeps": "keep", "keeping": "keep",
    "held": "hold", "holds": "hold", "holding": "hold",
    "stood": "stand", "stands": "stand", "standing": "stand",
    "sat": "sit", "sits": "sit", "sitting": "sit",
    "ran": "run", "runs": "run", "running": "run",
    "spoke": "speak", "spoken": "speak", "speaks": "speak", "speaking": "speak",
    "began": "begin", "begun": "begin", "begins": "begin", "beginning": "begin",
    "brought": "bring", "brings": "bring", "bringing": "bring",
    "caught": "catch", "catches": "catch", "catching": "catch",
    "fell": "fall", "fallen": "fall", "falls": "fall", "falling": "fall",
    "drew": "draw", "drawn": "draw", "draws": "draw", "drawing": "draw",
    "grew": "grow", "grown": "grow", "grows": "grow", "growing": "grow",
    "rose": "rise", "risen": "rise", "rises": "rise", "rising": "rise",
    "shook": "shake", "shaken": "shake", "shakes": "shake", "shaking": "shake",
    "bitten": "bite", "bites": "bite", "biting": "bite",
    "met": "meet", "meets": "meet", "meeting": "meet",
    "sent": "send", "sends": "send", "sending": "send",
    "lay": "lie", "lain": "lie", "lies": "lie", "lying": "lie",
    "swept": "sweep", "sweeps": "sweep", "sweeping": "sweep",
    "wore": "wear", "worn": "wear", "wears": "wear", "wearing": "wear",
    "struck": "strike", "strikes": "strike", "striking": "strike",
    "hung": "hang", "hangs": "hang", "hanging": "hang",
    "sank": "sink", "sunk": "sink", "sinks": "sink", "sinking": "sink",
    "drove": "drive", "driven": "drive", "drives": "drive", "driving": "drive",
    # regular verbs that dominate purple prose
    "walked": "walk", "walks": "walk", "walking": "walk",
    "looked": "look", "looks": "look", "looking": "look",
    "turned": "turn", "turns": "turn", "turning": "turn",
    "smiled": "smile", "smiles": "smile", "smiling": "smile",
    "smirked": "smirk", "smirks": "smirk", "smirking": "smirk",
    "grinned": "grin", "grins": "grin", "grinning": "grin",
    "whispered": "whisper", "whispers": "whisper", "whispering": "whisper",
    "murmured": "murmur", "murmurs": "murmur", "murmuring": "murmur",
    "sighed": "sigh", "sighs": "sigh", "sighing": "sigh",
    "nodded": "nod", "nods": "nod", "nodding": "nod",
    "leaned": "lean", "leans": "lean", "leaning": "lean",
    "gazed": "gaze", "gazes": "gaze", "gazing": "gaze",
    "glanced": "glance", "glances": "glance", "glancing": "glance",
    "stared": "stare", "stares": "stare", "staring": "stare",
    "reached": "reach", "reaches": "reach", "reaching": "reach",
    "trailed": "trail", "trails": "trail", "trailing": "trail",
    "traced": "trace", "traces": "trace", "tracing": "trace",
    "shivered": "shiver", "shivers": "shiver", "shivering": "shiver",
    "trembled": "tremble", "trembles": "tremble", "trembling": "tremble",
    "flickered": "flicker", "flickers": "flicker", "flickering": "flicker",
    "glinted": "glint", "glints": "glint", "glinting": "glint",
    "sparkled": "sparkle", "sparkles": "sparkle", "sparkling": "sparkle",
    "danced": "dance", "dances": "dance", "dancing": "dance",
    "crashed": "crash", "crashes": "crash", "crashing": "crash",
    "padded": "pad", "pads": "pad", "padding": "pad",
    "paused": "pause", "pauses": "pause", "pausing": "pause",
    "breathed": "breathe", "breathes": "breathe", "breathing": "breathe",
    "chuckled": "chuckle", "chuckles": "chuckle", "chuckling": "chuckle",
    "purred": "purr", "purrs": "purr", "purring": "purr",
    "narrowed": "narrow", "narrows": "narrow", "narrowing": "narrow",
    "widened": "widen", "widens": "widen", "widening": "widen",
    "tightened": "tighten", "tightens": "tighten", "tightening": "tighten",
    "softened": "soften", "softens": "soften", "softening": "soften",
    "hitched": "hitch", "hitches": "hitch", "hitching": "hitch",
    "escaped": "escape", "escapes": "escape", "escaping": "escape",
    # plural nouns
    "eyes": "eye", "hands": "hand", "fingers": "finger", "lips": "lip",
    "cheeks": "cheek", "shoulders": "shoulder", "arms": "arm", "legs": "leg",
    "words": "word", "voices": "voice", "shadows": "shadow", "walls": "wall",
    "doors": "door", "rooms": "room", "spines": "spine", "breaths": "breath",
    "hearts": "heart", "thoughts": "thought", "moments": "moment",
    "men": "man", "women": "woman", "children": "child", "feet": "foot",
    "teeth": "tooth",
    # comparatives
    "better": "good", "best": "good", "worse": "bad", "worst": "bad",
}
