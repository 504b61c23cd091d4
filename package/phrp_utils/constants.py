### MODIFICATION SYMBOLS

# Symbol given to a dynamic modification that could not be assigned a symbol
# from the default alphabet
LAST_RESORT_MODIFICATION_SYMBOL = "_"

# Static, terminal peptide static and isotopic modifications carry no symbol
NO_SYMBOL_MODIFICATION_SYMBOL = "-"

# Symbols handed out, in order, to dynamic modifications.
# Both sentinels above are excluded when the queue is built.
DEFAULT_MODIFICATION_SYMBOLS = "*#@$&!%~†‡¤º^`×÷+=ø¢"

UNKNOWN_MOD_BASE_NAME = "UnkMod"
INITIAL_UNKNOWN_MASS_CORRECTION_TAG_NAME = UNKNOWN_MOD_BASE_NAME + "00"

NO_AFFECTED_ATOM_SYMBOL = "-"

MASS_DIGITS_OF_PRECISION = 3
MASS_DIGITS_OF_PRECISION_LOOSE = 1

# Mass correction tag names are fixed width
MASS_CORRECTION_TAG_LENGTH = 8

### TERMINUS SENTINELS

N_TERMINAL_PEPTIDE_SYMBOL = "<"
C_TERMINAL_PEPTIDE_SYMBOL = ">"
N_TERMINAL_PROTEIN_SYMBOL = "["
C_TERMINAL_PROTEIN_SYMBOL = "]"

TERMINUS_SYMBOLS = (
    N_TERMINAL_PEPTIDE_SYMBOL,
    C_TERMINAL_PEPTIDE_SYMBOL,
    N_TERMINAL_PROTEIN_SYMBOL,
    C_TERMINAL_PROTEIN_SYMBOL,
)

# Flanking residue symbols used in peptide strings such as -.PEPTIDE.K
TERMINUS_SYMBOL_SEQUEST = "-"
TERMINUS_SYMBOL_XTANDEM_NTERMINUS = "["
TERMINUS_SYMBOL_XTANDEM_CTERMINUS = "]"

### MASS CORRECTION TAGS

DEFAULT_MASS_CORRECTION_TAGS = {
    "4xDeut": 4.025107,
    "6C134N15": 10.008269,
    "6xC13N15": 7.017164,
    "AcetAmid": 41.02655,
    "Acetyl": 42.010567,
    "Acrylmid": 71.037117,
    "ADPRibos": 541.061096,
    "AlkSulf": -25.0316,
    "Aminaton": 15.010899,
    "AmOxButa": -2.01565,
    "Bromo": 77.910507,
    "BS3Olnk": 156.078644,
    "C13DtFrm": 36.07567,
    "Carbamyl": 43.005814,
    "Cyano": 24.995249,
    "Cys-Dha": -33.98772,
    "Cystnyl": 119.004097,
    "Deamide": 0.984016,
    "DeutForm": 32.056407,
    "DeutMeth": 17.034479,
    "Dimethyl": 28.0313,
    "DTBP_Alk": 144.03573,
    "Formyl": 27.994915,
    "GalNAFuc": 648.2603,
    "GalNAMan": 664.2551,
    "Gluthone": 305.068146,
    "Guanid": 42.021797,
    "Heme_615": 615.169458,
    "Hexosam": 203.079376,
    "Hexose": 162.052826,
    "ICAT_D0": 442.225006,
    "ICAT_D8": 450.275208,
    "IodoAcet": 57.021465,
    "IodoAcid": 58.005478,
    "Iso_N15": 0.997035,
    "itrac": 144.102066,
    "iTRAQ8": 304.205353,
    "LeuToMet": 17.956421,
    "Lipid2": 576.51178,
    "Mercury": 199.9549,
    "Met_O18": 16.028204,
    "Methyl": 14.01565,
    "Methylmn": 13.031634,
    "MinusH2O": -18.010565,
    "NEM": 125.047676,
    "NH3_Loss": -17.026548,
    "NHS_SS": 87.998283,
    "NO2_Addn": 44.985077,
    "None": 0,
    "OMinus2H": 13.979265,
    "One_C12": 12,
    "One_O18": 2.004246,
    "OxoAla": -17.992805,
    "palmtlic": 236.21402,
    "PCGalNAz": 502.202332,
    "PEO": 414.193695,
    "PhosAden": 329.052521,
    "Phosph": 79.966331,
    "PhosUrid": 306.025299,
    "Plus1Oxy": 15.994915,
    "Plus2Oxy": 31.989828,
    "Plus3Oxy": 47.984745,
    "Propnyl": 56.026215,
    "Pyro-cmC": 39.994915,
    "SATA_Alk": 131.0041,
    "SATA_Lgt": 115.9932,
    "Sucinate": 116.010956,
    "SulfoNHS": 226.077591,
    "Sumoylat": 484.228149,
    "TMT0Tag": 224.152481,
    "TMT6Tag": 229.162933,
    "TriMeth": 42.046951,
    "Two_O18": 4.008491,
    "Ubiq_02": 114.042931,
    "Ubiq_L": 100.016045,
    "ValToMet": 31.972071,
}

# Modifications frequently reported by refinement searches.
# Entries are (mass, target residues).
STANDARD_REFINEMENT_MODIFICATIONS = [
    (-17.026549, "Q"),  # NH3 loss on pyro-glu
    (-18.0106, "E"),  # H2O loss on pyro-glu
]

# UniMod names accepted in place of mass correction tags
UNIMOD_NAME_MASSES = {
    "deamidated": 0.984016,
    "methyl": 14.01565,
    "oxidation": 15.994915,
    "acetyl": 42.010567,
    "phospho": 79.966331,
}

### MASSES

MASS_HYDROGEN = 1.0078246
MASS_OXYGEN = 15.9949141
MASS_PROTON = 1.00727649
MASS_ELECTRON = 0.00054811
MASS_C13 = 1.00335483

# Monoisotopic residue masses, as used for every synopsis file.
# J is a placeholder and has no mass.
AMINO_ACID_MASSES = {
    "A": 71.0371100902557,
    "B": 114.042921543121,
    "C": 103.009180784225,
    "D": 115.026938199997,
    "E": 129.042587518692,
    "F": 147.068408727646,
    "G": 57.0214607715607,
    "H": 137.058904886246,
    "I": 113.084058046341,
    "J": 0.0,
    "K": 128.094955444336,
    "L": 113.084058046341,
    "M": 131.040479421616,
    "N": 114.042921543121,
    "O": 114.079306125641,
    "P": 97.0527594089508,
    "Q": 128.058570861816,
    "R": 156.101100921631,
    "S": 87.0320241451263,
    "T": 101.047673463821,
    "U": 150.95363,
    "V": 99.0684087276459,
    "W": 186.079306125641,
    "X": 113.084058046341,
    "Y": 163.063322782516,
    "Z": 128.058570861816,
}

# Residue formulas for letters that are absent from, or differ from, the
# standard composition table. J has no formula.
RESIDUE_FORMULA_OVERRIDES = {
    "B": "C4H6N2O2",
    "J": None,
    "O": "C5H10N2O",
    "U": "C3H5NOSe",
    "X": "C6H11NO",
    "Z": "C5H8N2O2",
}
