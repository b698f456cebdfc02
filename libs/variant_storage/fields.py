# =============================================================================
# Variant Document Field Names
# =============================================================================
# Short field names of the variant documents stored in MongoDB.
# =============================================================================

# Variant document
ID_FIELD = "_id"
CHROMOSOME_FIELD = "chr"
START_FIELD = "start"
END_FIELD = "end"
LENGTH_FIELD = "len"
REFERENCE_FIELD = "ref"
ALTERNATE_FIELD = "alt"
TYPE_FIELD = "type"
IDS_FIELD = "ids"
HGVS_FIELD = "hgvs"
FILES_FIELD = "files"
STATS_FIELD = "st"
AT_FIELD = "_at"
CHUNK_IDS_FIELD = "chunkIds"
ANNOTATION_FIELD = "annot"

# Source entry (elements of FILES_FIELD)
FILE_ID_FIELD = "fid"
STUDY_ID_FIELD = "sid"
ATTRIBUTES_FIELD = "attrs"
FORMAT_FIELD = "fm"
SAMPLES_FIELD = "samp"
DEFAULT_GENOTYPE_FIELD = "def"

# Cohort statistics (elements of STATS_FIELD)
COHORT_ID_FIELD = "cid"
MAF_FIELD = "maf"
MGF_FIELD = "mgf"
MAF_ALLELE_FIELD = "mafAl"
MGF_GENOTYPE_FIELD = "mgfGt"
MISSING_ALLELES_FIELD = "missAl"
MISSING_GENOTYPES_FIELD = "missGt"
NUM_GENOTYPES_FIELD = "numGt"
